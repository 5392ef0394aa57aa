# Routes package init
"""
Microblog Backend — API Routes Package
========================================

Route Inventory:
    - posts.py:   POST /posts   (create a post)
                  GET  /posts   (list all posts)

Any other method or path is answered with 404 by the handlers in main.py.

Design Principle:
    Routes are THIN. They read the request, call PostService, and return
    the result. Business rules live in services.
"""
