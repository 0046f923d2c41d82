from y2manager.cli.app import app

app(prog_name="y2manager")
