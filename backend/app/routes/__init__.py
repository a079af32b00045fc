# Routes package init
"""
StudyMate Backend — API Routes Package
========================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - partners.py:  /partners, /topPartners, /myConnections, /sendRequest/{id}
    - requests.py:  /requests, /requests/{id}
    - health.py:    GET /  (liveness text)
                    GET /health (store connectivity)

Design Principle:
    Routes are THIN — they extract path/query/body, call a service, and
    return its result. Query construction lives in services.
"""
