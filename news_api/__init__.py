"""News publishing API: users, categories and news with an admin-gated write path."""
