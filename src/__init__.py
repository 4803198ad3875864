"""
Content Page Editor - Sidebar/editor front end for a remote content API.

Validates page titles and bodies, talks to the content API over HTTP with
httpx, and renders the page list and editor with FastAPI + Jinja2.
"""
