"""CRUD operations for note file entities using FastCRUD."""

from fastcrud import FastCRUD

from .models import NoteFile

note_file_crud: FastCRUD = FastCRUD(NoteFile)
