"""Client-side state and synchronization layer for the storefront."""
