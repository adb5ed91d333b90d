"""
Test suite for the Taskboard application.

This package contains:
- unit/: models, data store, session store and service logic in isolation
- integration/: the HTTP surface through the Flask test client
- security/: session cookie hardening and credential handling
"""
