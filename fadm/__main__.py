from fadm.commands import cli

cli()
