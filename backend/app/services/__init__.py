# Services package init
"""
StudyMate Backend — Services Layer
====================================

What:  Query and update construction between routes (HTTP) and MongoDB.

Service Inventory:
    - PartnerService: partners collection (filters, top-rated, full replace, $inc)
    - RequestService: requests collection (create, list by userEmail, merge update)

Both are stateless singletons; the database handle is passed to every call.
"""
