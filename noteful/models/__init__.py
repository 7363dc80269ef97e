# Importing the models registers every table on Base.metadata
from noteful.models.folder import Folder
from noteful.models.note import Note, note_tags
from noteful.models.tag import Tag

__all__ = ["Folder", "Note", "Tag", "note_tags"]
