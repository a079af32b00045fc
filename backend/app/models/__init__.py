# Models package init
"""
StudyMate Backend — Document Models
=====================================

What:  Collection names and helpers shared by every store operation:
       ObjectId parsing, document serialization, timestamps.
Why:   MongoDB documents are schemaless; the only structure the store
       enforces is the `_id` field. Everything else lives in schemas/.
"""
