from depot.frontend.cli.app import entrypoint

entrypoint()
