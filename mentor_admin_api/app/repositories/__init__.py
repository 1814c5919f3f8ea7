"""
Data access for users, tasks and mentor assignments.

Repository methods take an open ``sqlite3.Connection`` as their first
argument.  Whoever opens the connection owns the transaction: all calls
made with the same connection inside ``core.db.transaction`` commit or
roll back together.
"""
