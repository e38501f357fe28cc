"""
Service layer abstraction.

Each service encapsulates business logic for a domain and talks to
MongoDB through ``core.db``.  Services raise the errors defined in
``core.exceptions``; translating them into HTTP responses is the
endpoints' job.
"""
