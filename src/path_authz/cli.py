import logging
import sys
from pathlib import Path
from typing import Optional

import click
import yaml

from path_authz.engine.decision import PolicyEngine
from path_authz.engine.request import AccessKind, AuthzRequest, Identity
from path_authz.engine.utils import normalize_path
from path_authz.exceptions import PolicyLoadError
from path_authz.explain import explain as explain_decision
from path_authz.spec.document import PolicyDocument
from path_authz.spec.loader import load_policy

ACCESS_CHOICES = {
    "read": AccessKind.READ,
    "write": AccessKind.WRITE,
    "recursive": AccessKind.READ_RECURSIVE,
}


def _load(policy_file: str) -> PolicyDocument:
    try:
        return load_policy(Path(policy_file).expanduser())
    except PolicyLoadError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)


def _request(
    repo: str, path: Optional[str], user: Optional[str], access: str
) -> AuthzRequest:
    return AuthzRequest(
        repository=repo,
        path=normalize_path(path) if path is not None else None,
        identity=Identity.named(user) if user else Identity.anonymous(),
        kind=ACCESS_CHOICES[access],
    )


def request_options(fn):
    fn = click.option(
        "--access",
        "-a",
        type=click.Choice(list(ACCESS_CHOICES)),
        default="read",
        show_default=True,
        help="Access kind to check",
    )(fn)
    fn = click.option("--user", "-u", help="Username; omit for anonymous")(fn)
    fn = click.option("--path", "-p", help="Repository path; omit if unknown")(fn)
    fn = click.option("--repo", "-r", required=True, help="Repository name")(fn)
    return fn


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log rule evaluation")
def main(verbose: bool):
    """Path-based repository authorization."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("policy_file", type=click.Path(exists=True))
@request_options
def check(
    policy_file: str, repo: str, path: Optional[str], user: Optional[str], access: str
):
    """Print whether access is allowed; exit status 1 when denied."""
    engine = PolicyEngine(_load(policy_file))
    allowed = engine.check(_request(repo, path, user, access))
    click.echo("allowed" if allowed else "denied")
    if not allowed:
        sys.exit(1)


@main.command()
@click.argument("policy_file", type=click.Path(exists=True))
@request_options
def explain(
    policy_file: str, repo: str, path: Optional[str], user: Optional[str], access: str
):
    """Show which section decides a request."""
    engine = PolicyEngine(_load(policy_file))
    click.echo(str(explain_decision(engine, _request(repo, path, user, access))))


@main.command()
@click.argument("policy_file", type=click.Path(exists=True))
def validate(policy_file: str):
    """Load a policy file and summarize it."""
    document = _load(policy_file)
    click.echo(
        f"✅ {len(document.sections)} sections, {len(document.groups)} groups"
    )


@main.command()
@click.argument("policy_file", type=click.Path(exists=True))
@click.option("--output", "-o", type=click.Path(), help="Write YAML snapshot here")
def dump(policy_file: str, output: Optional[str]):
    """Export a policy file as a YAML snapshot."""
    document = _load(policy_file)
    if output:
        document.save(Path(output).expanduser())
        click.echo(f"✅ Snapshot saved: {output}")
    else:
        click.echo(
            yaml.safe_dump(document.to_dict(), default_flow_style=False, sort_keys=False),
            nl=False,
        )


if __name__ == "__main__":
    main()
