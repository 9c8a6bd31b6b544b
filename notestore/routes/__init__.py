"""
NoteStore — API Routes Package
===============================

Route Inventory:
    - notes.py:   GET/PUT/DELETE /notes/{name}, GET /notes, POST /write
    - pages.py:   GET /UploadForm.html
    - health.py:  GET /health

Routes are thin: they pick a status code and body and delegate everything
else to the request schemas and NoteStore.
"""
