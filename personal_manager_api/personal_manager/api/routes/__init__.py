"""
API route modules.

This package contains subrouters for:
- Auth: register, login and current user
- Users: admin-only account management
- Portfolio: profiles, educations, work experiences, skills, portfolios, contact methods
- Planner: calendar events, to-do items, work tasks
- Content: blog posts and the guestbook
- System: health probe

Routers are included from personal_manager.api.main (under the /api prefix).
"""
