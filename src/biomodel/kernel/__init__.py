"""Schema kernel: document model, mixin resolution, validation, lint."""
