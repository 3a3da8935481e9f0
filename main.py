"""WSGI entrypoint for the recipebox service.

The Flask development server is not started from this module. Local
development can use ``flask --app main run``, which imports the ``app``
object defined below; production servers point their WSGI loader at
``main:app``.
"""

from recipebox import create_app

app = create_app()


__all__ = ["app"]
