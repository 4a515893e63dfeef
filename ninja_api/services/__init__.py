"""
Service layer: business operations over the ninja registry and the stateless
mapper between wire schemas and ORM records.
"""
