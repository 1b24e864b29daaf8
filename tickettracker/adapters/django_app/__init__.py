"""
Adapter Django: models, repositórios, Unit of Work e API JSON.
"""
