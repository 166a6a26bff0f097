"""Helps view, search, edit and create notes stored as plain files in a directory.

If you installed via ``pip``, run ``notesh -h`` to get help.
Or, run ``python3 -m notesh -h``.

The search, editing and paging is done by external programs; see :mod:`notesh.conf` for how to choose them.
"""
