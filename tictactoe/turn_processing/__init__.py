"""Join/turn validation helpers.

Both mutating operations run their checks through a validator pipeline so
the order in which rule errors are reported lives in one place.
"""
