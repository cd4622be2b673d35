"""CRUD operations for chat history using FastCRUD."""

from fastcrud import FastCRUD

from .models import ChatHistoryEntry

chat_history_crud: FastCRUD = FastCRUD(ChatHistoryEntry)
