"""Wiki export for retrieval-augmented question answering."""
