"""
AtlasIT - Application Layer.

Modules:
- session: Selection state shared by the loaders (no module globals).
- loans: Library loans by category (bar chart).
- reading: Reading habits by region (line chart).
- libraries: Collection sizes (pie), state libraries (choropleths), locations (points).
- events: Cultural events per city (bubble chart).
"""

# Explicitly empty to prevent eager loading.
# Users should use: from atlasit.app.loans import load_loans
