"""Application layer: DTOs shared by repositories, services and routes.

No dependency on the ORM; infrastructure maps rows to these types.
"""
