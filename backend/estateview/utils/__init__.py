"""Utils package initialization."""
