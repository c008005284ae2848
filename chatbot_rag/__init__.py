"""Multi-tenant chatbot builder backend with retrieval-augmented chat."""
