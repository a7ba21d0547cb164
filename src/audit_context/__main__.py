from audit_context.cli import cli

cli(prog_name="audit-context")
