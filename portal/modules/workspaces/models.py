# Supabase table: workspaces
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key, default: gen_random_uuid())
- name: text (not null)
- description: text (nullable)
- workspace_type: text (not null, one of 'dev' | 'qa' | 'review' | 'design' | 'documentation')
- created_by: uuid (foreign key to auth.users.id, not null)
- created_at: timestamp (default: now())

Workspaces are never updated or deleted through this service.
"""
