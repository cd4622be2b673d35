"""CRUD operations for subject entities using FastCRUD."""

from fastcrud import FastCRUD

from .models import Subject

subject_crud: FastCRUD = FastCRUD(Subject)
