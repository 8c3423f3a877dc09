"""Bookings app package.

A booking is one guest's stay at one property. Creating, editing and
cancelling bookings goes through ``services``, which checks availability
and prices the stay while the property row is locked, so overlapping
active bookings never reach the database.
"""
