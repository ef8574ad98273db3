"""
Domain layer - Contains the user entity, configuration value objects, and the
interfaces the application and infrastructure layers meet at.
"""
