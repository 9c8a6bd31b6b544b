"""
NoteStore — Services Layer
===========================

What:  Persistence logic sitting between routes (HTTP) and the filesystem.
Why:   Routes handle HTTP; services own every file operation and error mapping.

Service Inventory:
    - NoteStore: one-file-per-note storage (read, list, create, replace, delete)
"""
