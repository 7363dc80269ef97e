# Routes package init
"""
Noteful Backend — API Routes Package
======================================

Route Inventory:
    - notes.py:    /api/notes    (CRUD + searchTerm/folderId/tagId filters)
    - folders.py:  /api/folders  (CRUD, sorted by name)
    - tags.py:     /api/tags     (CRUD, delete pulls tag from notes)
    - health.py:   GET /health   (database probe)

Routes stay THIN: pull data out of the request, call a service, shape the
HTTP response. Validation messages and queries live in the services.
"""
