"""Core (UI-agnostic) table logic.

This package contains:
- the record model (CSV row -> immutable Record)
- configuration loading (.env / environment -> Settings)
- the S3 source client (GetObject -> streaming body)
- CSV decoding (pandas -> Records)
- the view model (filter -> sort -> paginate)
"""
