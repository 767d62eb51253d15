"""Helper workforce dashboard package.

Organized by feature modules (contractors, helpers, attendance, reports, ...)
with a thin Flask controller layer over service/repository layers. The
in-memory data layer in ``data`` is the single writer of the cached
collections; everything else reads snapshots.
"""
