"""Businesses app package.

A business is the tenant of the back office: it owns properties, the
payment methods quoted to guests and the email templates staff send from
the booking screens. Payment detail lookup and email composition live
here as well.
"""
