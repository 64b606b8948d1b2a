"""flagauth - hierarchical permission flags for users, roles and external identities."""

__version__ = "0.1.0"
