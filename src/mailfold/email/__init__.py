"""Email backends for mailfold."""
