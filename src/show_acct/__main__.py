from show_acct.adapters.inbound.cli import app

app(prog_name="show-acct")
