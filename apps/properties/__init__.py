"""Properties app package.

Properties and their calendars: blocked dates, nightly price ranges, the
availability checker shared with bookings and the price aggregator.
"""
