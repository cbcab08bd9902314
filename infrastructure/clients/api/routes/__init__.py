# importing the modules registers their routes
from . import companies, contacts, deals  # noqa: F401
