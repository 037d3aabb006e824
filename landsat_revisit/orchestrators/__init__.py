"""Request orchestration.

- revisit: ``RevisitService`` (lookup / today) and ``build_service`` wiring
"""
