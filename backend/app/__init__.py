"""
StudyMate Backend — Application Package Initializer
=====================================================

What:  Study partner matching API (partners + connection requests on MongoDB).

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Query & Update Logic)   │  ← filters, sorts, $set/$inc
    ├─────────────────────────────────────┤
    │   Schemas & Document Helpers        │  ← pydantic records, ObjectId
    ├─────────────────────────────────────┤
    │     Database (motor client)         │  ← lifespan-managed, injected
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
