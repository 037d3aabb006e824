"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Upstream key conventions and table column names
- exceptions: Service exception hierarchy
- ingress: HTTP parameter parsing and error mapping
"""
