from miniminer.cli import app

app(prog_name="miniminer")
