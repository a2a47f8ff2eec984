# Routes package init
"""
Blog API Backend — API Routes Package
=======================================

Route Inventory:
    - users.py:    POST /login, POST /user, GET /user/profile
    - articles.py: GET /home, GET /articles, POST /articles/create,
                   POST /articles/{id}/comment, POST /articles/{id}/like,
                   POST /articles/{id}/dislike, DELETE /articles/{id}
    - health.py:   GET /health

Routes stay thin: read the Email header, path ids and body, call
BlogService, pick the status code. Wrong methods get 405 from the router.
"""
