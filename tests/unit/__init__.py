"""
Unit Tests Module

One module per component; no network access and no real renames outside
pytest's tmp_path.
"""
