"""
HTTP test package for Taskboard.

Tests use the Flask test client and demonstrate:
- Registration, login and logout flows
- Session gating of protected routes
- Task add/list/delete behaviour across users
"""
