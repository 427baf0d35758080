"""
Use Cases

Organized into domain folders:
- auth/: Credential and session flows
- maintenance/: Background cleanup

Import from subdirectories.
"""
