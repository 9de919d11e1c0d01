# Supabase table: files
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key, default: gen_random_uuid())
- workspace_id: uuid (foreign key to workspaces.id, not null)
- file_name: text (not null) - original name shown to users
- file_path: text (not null, unique) - blob path: {workspace_id}/{epoch_nanos}{.ext}
- file_size: bigint (nullable) - bytes
- mime_type: text (nullable)
- uploaded_by: uuid (foreign key to auth.users.id, not null)
- created_at: timestamp (default: now())

Blob bytes live in the storage bucket (default 'workspace-files') under file_path.
A row and its blob are created and removed together.
"""
