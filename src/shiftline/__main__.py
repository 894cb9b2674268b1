from shiftline.cli.main import app

app(prog_name="shiftline")
