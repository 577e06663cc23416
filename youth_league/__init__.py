"""Youth league engine: teams, fixtures, scores and a derived standings table."""
