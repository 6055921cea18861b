"""Built-in commands of the ``apiclientkit`` command line."""
