"""Auto-initialization of intermediate containers as a staged plan.

- plan.py: build_plan (read-only), validate_plan (stages instances), apply_plan (writes)
"""
