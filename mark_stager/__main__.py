from mark_stager.main import cli

cli()
