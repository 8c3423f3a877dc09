"""
Shared Kernel

Date interval arithmetic, money value objects and the domain error taxonomy
used by every app, plus the infrastructure glue that maps them onto Django
and DRF.
"""
