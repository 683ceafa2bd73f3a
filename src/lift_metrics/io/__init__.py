"""JSON / JSONL input and output."""
