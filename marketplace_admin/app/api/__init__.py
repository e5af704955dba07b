"""
Admin HTTP surface.

API versions live in subpackages such as ``v1``; each exposes a
top‑level ``router`` that includes its domain endpoints.
"""
