"""auth/ -- Credential store and authentication pipeline.

Layer rule: auth/ imports only stdlib + third-party libraries. It does NOT
import from api/, core/ or fastapi. api/ imports from auth/, not the other
way around; configuration values are passed in as arguments.
"""
