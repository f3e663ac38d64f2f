"""Host adapters for chatscribe: file sink, console status, chat feed."""
