"""Shared kernel.

Tenant context, authentication, authorization and the error taxonomy that
every bounded context agrees on. Nothing here knows about persistence or
about any particular bounded context.
"""
