#!/usr/bin/env python3
"""
Command-line client for a running Todoboard server.
"""
import json
import os
import sys
from typing import Any, Optional

import click

from todoboard.adapters import HTTPClientAdapterFactory, HTTPResponse, RequestError


def get_service_url() -> str:
    """Get service URL from environment or default."""
    return os.getenv("TODOBOARD_URL", "http://localhost:8000")


def make_request(
    method: str,
    endpoint: str,
    token: Optional[str] = None,
    base_url: Optional[str] = None,
    **kwargs
) -> HTTPResponse:
    """Make an HTTP request to the service, exiting on connection errors."""
    base_url = base_url or get_service_url()
    url = f"{base_url.rstrip('/')}/{endpoint.lstrip('/')}"

    headers = kwargs.pop("headers", {})
    if token:
        headers["Authorization"] = f"Bearer {token}"

    with HTTPClientAdapterFactory.create_client(timeout=30.0) as client:
        try:
            return client.request(method.upper(), url, headers=headers, **kwargs)
        except RequestError as e:
            click.echo(f"Error: could not reach {base_url}: {e}", err=True)
            sys.exit(1)


def check_response(response: HTTPResponse) -> None:
    """Print the error body and exit if the response is not a success."""
    if response.is_success:
        return
    error_data = response.json() if response.content else {}
    message = error_data.get("message") or error_data.get("detail") or "Unknown error"
    click.echo(f"Error {response.status_code}: {message}", err=True)
    for code, descriptions in (error_data.get("errors") or {}).items():
        for description in descriptions:
            click.echo(f"  {code}: {description}", err=True)
    sys.exit(1)


def format_json(data: Any) -> str:
    """Format data as JSON."""
    return json.dumps(data, indent=2, default=str, ensure_ascii=False)


@click.group()
@click.option('--url', envvar='TODOBOARD_URL', default=None,
              help='Service URL (default: http://localhost:8000)')
@click.option('--token', envvar='TODOBOARD_TOKEN', default=None,
              help='Bearer access token')
@click.pass_context
def cli(ctx, url, token):
    """Todoboard CLI tool for managing to-do lists."""
    ctx.ensure_object(dict)
    ctx.obj['url'] = url or get_service_url()
    ctx.obj['token'] = token


@cli.command()
@click.option('--email', required=True, help='Email address (also the user name)')
@click.password_option()
@click.pass_context
def register(ctx, email, password):
    """Register a new user."""
    response = make_request(
        'POST', '/api/Users/register',
        base_url=ctx.obj['url'],
        json={'email': email, 'password': password},
    )
    check_response(response)
    click.echo(f"Registered {email}")


@cli.command()
@click.option('--email', required=True, help='Email address')
@click.option('--password', prompt=True, hide_input=True)
@click.pass_context
def login(ctx, email, password):
    """Log in and print the access token."""
    response = make_request(
        'POST', '/api/Users/login',
        base_url=ctx.obj['url'],
        json={'email': email, 'password': password},
    )
    check_response(response)
    click.echo(response.json()['access_token'])


@cli.command()
@click.option('--format', 'output_format', type=click.Choice(['table', 'json']),
              default='table', help='Output format')
@click.pass_context
def lists(ctx, output_format):
    """Show every to-do list."""
    response = make_request('GET', '/api/TodoLists', token=ctx.obj['token'], base_url=ctx.obj['url'])
    check_response(response)
    todo_lists = response.json()

    if output_format == 'json':
        click.echo(format_json(todo_lists))
        return
    if not todo_lists:
        click.echo("No lists found.")
        return
    for todo_list in todo_lists:
        click.echo(f"#{todo_list['id']}: {todo_list['title']} ({todo_list['item_count']} items)")


@cli.command('add-item')
@click.option('--list-id', type=int, required=True, help='List to add the item to')
@click.argument('title')
@click.pass_context
def add_item(ctx, list_id, title):
    """Add an item to a list."""
    response = make_request(
        'POST', '/api/TodoItems',
        token=ctx.obj['token'],
        base_url=ctx.obj['url'],
        json={'list_id': list_id, 'title': title},
    )
    check_response(response)
    click.echo(f"Created item {response.json()['id']}")


if __name__ == '__main__':
    cli()
