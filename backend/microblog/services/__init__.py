# Services package init
"""
Microblog Backend — Services Layer
====================================

Service Inventory:
    - PostService: non-empty check, id generation, store delegation
"""
