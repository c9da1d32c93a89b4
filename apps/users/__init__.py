"""Users app package.

Defines the custom user model with guest, front desk staff and admin
roles, JWT authentication endpoints and the role based permission classes
the other apps use. Use ``apps.users.models.CustomUser`` as the
AUTH_USER_MODEL throughout the project.
"""
