# Services package init
"""
Blog API Backend — Services Layer
===================================

What:  The data access layer between routes (HTTP) and the database.
How:   Stateless services receive the request's AsyncSession explicitly on
       every call, so they hold no connection state of their own.

Service Inventory:
    - BlogService: users, articles, comments, likes (blog_service.py)
"""
