"""Libellus command line control tool."""
import asyncio
import functools

import click

from libellus.bridge import ApiClient, PersistenceBridge
from libellus.error import LibellusException


def open_bridge(options) -> PersistenceBridge:
    options = options or {}
    client = ApiClient(
        base_url=options.get('api_url'),
        token=options.get('token'),
        transport=options.get('transport'),
    )
    return PersistenceBridge(client)


def bridge_command(func):
    ''' Run an async command with a bridge opened from the group options. '''
    @functools.wraps(func)
    @click.pass_context
    def wrapper(ctx, *args, **kwargs):
        async def run():
            async with open_bridge(ctx.obj) as bridge:
                return await func(bridge, *args, **kwargs)

        try:
            return asyncio.run(run())
        except LibellusException as e:
            raise click.ClickException(f"[{e.errcode}] {e.message}")

    return wrapper
