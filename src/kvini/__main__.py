from kvini.cli.app import app

app(prog_name="kvini")
