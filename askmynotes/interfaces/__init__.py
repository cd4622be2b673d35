"""HTTP interfaces of the AskMyNotes service."""
