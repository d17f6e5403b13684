"""Services package initialization."""
