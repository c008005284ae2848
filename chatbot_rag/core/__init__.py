"""Domain logic: chunking, provider gateways, prompts, and exceptions."""
