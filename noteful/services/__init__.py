# Services package init
"""
Noteful Backend — Services Layer
==================================

What:  Business logic between routes (HTTP) and the database.
How:   Each service is a stateless singleton; routes pass in the request's
       AsyncSession and get response schemas back.

Service Inventory:
    - NamedResourceService: shared CRUD for unique-name resources
    - FolderService: folders; delete clears notes' folder reference
    - TagService: tags; delete pulls the tag out of every note
    - NoteService: notes with folder/tag population and list filters
"""
