from registry_publish.cli import app

app()
