"""EstateView real estate listings backend."""
