"""
Service layer abstraction.

Each service encapsulates the workflows of a domain.  Services open
connections or transactions and pass them to the repositories, so API
handlers never deal with SQL or transaction boundaries.
"""
