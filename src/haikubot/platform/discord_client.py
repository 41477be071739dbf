"""discord.py adapter for the command core."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any, TypeAlias

import discord

from haikubot.commands.parser import RawInteraction, RawOption
from haikubot.commands.schema import CommandSpec, ParameterKind
from haikubot.config import HaikuBotConfig
from haikubot.platform.types import (
    DisplayPayload,
    EmbedPayload,
    NavigationControl,
    PlatformError,
)
from haikubot.runtime import BotRuntime, navigation_action
from haikubot.store import HaikuStore

_LOGGER = logging.getLogger(__name__)

CHAT_INPUT_COMMAND_TYPE = 1
OPTION_TYPES: dict[ParameterKind, int] = {
    ParameterKind.STRING: 3,
    ParameterKind.INTEGER: 4,
    ParameterKind.BOOLEAN: 5,
    ParameterKind.NUMBER: 10,
}
_KINDS_BY_TYPE = {value: kind for kind, value in OPTION_TYPES.items()}

NavigateCallback: TypeAlias = Callable[[discord.Interaction, str], Awaitable[None]]


def command_payload(spec: CommandSpec) -> dict[str, Any]:
    """Convert one command spec into a Discord application command payload."""
    return {
        "name": spec.name,
        "description": spec.description,
        "type": CHAT_INPUT_COMMAND_TYPE,
        "options": [
            {
                "name": parameter.name,
                "description": parameter.description,
                "type": OPTION_TYPES[parameter.kind],
                "required": parameter.required,
            }
            for parameter in spec.parameters
        ],
    }


def raw_interaction_from_payload(
    data: Mapping[str, Any],
    *,
    interaction_id: str,
    server_id: int | None,
    user_id: int | None = None,
) -> RawInteraction:
    """Convert Discord command interaction data into a platform-neutral event.

    Options of types the bot never declares are dropped.

    Args:
        data: `data` object of an application command interaction.
        interaction_id: Interaction snowflake.
        server_id: Guild snowflake, None in direct messages.
        user_id: Invoking user snowflake.

    Returns:
        Raw interaction for the parser.
    """
    options = tuple(
        RawOption(
            name=str(option["name"]),
            kind=_KINDS_BY_TYPE[option["type"]],
            value=option.get("value"),
        )
        for option in data.get("options") or ()
        if option.get("type") in _KINDS_BY_TYPE
    )
    return RawInteraction(
        interaction_id=interaction_id,
        command_name=str(data.get("name", "")),
        options=options,
        server_id=server_id,
        user_id=user_id,
    )


def _to_embed(payload: EmbedPayload) -> discord.Embed:
    embed = discord.Embed(
        title=payload.title,
        description=payload.description,
        color=payload.color,
    )
    if payload.footer:
        embed.set_footer(text=payload.footer)
    return embed


class _NavigationButton(discord.ui.Button["NavigationView"]):
    def __init__(self, control: NavigationControl, on_navigate: NavigateCallback):
        super().__init__(
            style=discord.ButtonStyle.primary,
            label=control.label,
            custom_id=control.custom_id,
            disabled=control.disabled,
        )
        self._on_navigate = on_navigate

    async def callback(self, interaction: discord.Interaction) -> None:
        await self._on_navigate(interaction, self.custom_id or "")


class NavigationView(discord.ui.View):
    """Button row whose lifetime is owned by the result pager."""

    def __init__(
        self,
        controls: Sequence[NavigationControl],
        on_navigate: NavigateCallback,
    ) -> None:
        super().__init__(timeout=None)
        for control in controls:
            self.add_item(_NavigationButton(control, on_navigate))

    def apply(self, controls: Sequence[NavigationControl]) -> None:
        """Copy enabled state of rendered controls onto the existing buttons."""
        disabled = {control.custom_id: control.disabled for control in controls}
        for item in self.children:
            if isinstance(item, discord.ui.Button) and item.custom_id in disabled:
                item.disabled = disabled[item.custom_id]


class DiscordResponder:
    """Initial response channel for one Discord interaction."""

    def __init__(
        self, interaction: discord.Interaction, client: DiscordPlatformClient
    ) -> None:
        self._interaction = interaction
        self._client = client

    async def send(self, payload: DisplayPayload) -> str:
        kwargs = self._client.message_kwargs(payload)
        try:
            await self._interaction.response.send_message(**kwargs)
            message = await self._interaction.original_response()
        except discord.DiscordException as exc:
            raise PlatformError(str(exc)) from exc
        response_id = str(message.id)
        if payload.controls:
            self._client.track(response_id, message, kwargs["view"])
        return response_id


class DiscordPlatformClient:
    """`PlatformClient` implementation over a connected discord.py client."""

    def __init__(
        self,
        bot: discord.Client,
        *,
        guild_id: int | None = None,
        on_navigate: NavigateCallback,
    ) -> None:
        """Store discord dependencies.

        Args:
            bot: Logged-in discord.py client.
            guild_id: Guild to register commands in; global when None.
            on_navigate: Coroutine called for every navigation button click.
        """
        self._bot = bot
        self._guild_id = guild_id
        self._on_navigate = on_navigate
        self._messages: dict[str, discord.InteractionMessage] = {}
        self._views: dict[str, NavigationView] = {}

    def message_kwargs(
        self, payload: DisplayPayload, *, view: NavigationView | None = None
    ) -> dict[str, Any]:
        """Build `send_message`/`edit` keyword arguments for a payload.

        A response keeps one view for its whole lifetime. Passing the tracked
        view updates its buttons in place; replacing it would unregister the
        button ids discord.py routes clicks by.

        Args:
            payload: Rendered display.
            view: View already attached to the response, if any.

        Returns:
            Keyword arguments for `send_message` or `edit`.
        """
        kwargs: dict[str, Any] = {
            "content": payload.content,
            "embeds": [_to_embed(embed) for embed in payload.embeds],
        }
        if payload.controls:
            if view is None:
                view = NavigationView(payload.controls, self._on_navigate)
            else:
                view.apply(payload.controls)
            kwargs["view"] = view
        return kwargs

    def track(
        self,
        response_id: str,
        message: discord.InteractionMessage,
        view: NavigationView,
    ) -> None:
        """Remember a response whose controls can later be edited or disabled."""
        self._messages[response_id] = message
        self._views[response_id] = view

    async def register_commands(self, specs: Sequence[CommandSpec]) -> list[str]:
        application_id = self._bot.application_id
        if application_id is None:
            raise PlatformError("Client is not logged in; application id unknown")
        payload = [command_payload(spec) for spec in specs]
        try:
            if self._guild_id is None:
                created = await self._bot.http.bulk_upsert_global_commands(
                    application_id, payload
                )
            else:
                created = await self._bot.http.bulk_upsert_guild_commands(
                    application_id, self._guild_id, payload
                )
        except discord.HTTPException as exc:
            raise PlatformError(str(exc)) from exc
        return [str(command["id"]) for command in created]

    async def edit_response(self, response_id: str, payload: DisplayPayload) -> None:
        message = self._messages.get(response_id)
        if message is None:
            raise PlatformError(f"Unknown response {response_id}")
        kwargs = self.message_kwargs(payload, view=self._views.get(response_id))
        try:
            await message.edit(**kwargs)
        except discord.DiscordException as exc:
            raise PlatformError(str(exc)) from exc

    async def disable_controls(self, response_id: str) -> None:
        message = self._messages.pop(response_id, None)
        view = self._views.pop(response_id, None)
        if message is None or view is None:
            return
        for item in view.children:
            if isinstance(item, discord.ui.Button):
                item.disabled = True
        view.stop()
        try:
            await message.edit(view=view)
        except discord.DiscordException as exc:
            raise PlatformError(str(exc)) from exc


class HaikuBotClient(discord.Client):
    """discord.py client routing interactions into the bot runtime."""

    def __init__(self, *, store: HaikuStore, config: HaikuBotConfig) -> None:
        """Build platform adapter and runtime.

        Args:
            store: Haiku store served by the bot.
            config: Loaded bot configuration.
        """
        super().__init__(intents=discord.Intents.default())
        self.platform = DiscordPlatformClient(
            self, guild_id=config.discord.guild_id, on_navigate=self._navigate
        )
        self.runtime = BotRuntime(
            client=self.platform,
            store=store,
            ttl_seconds=config.pager.ttl_seconds,
        )

    async def setup_hook(self) -> None:
        await self.runtime.start()

    async def on_ready(self) -> None:
        _LOGGER.info("Connected as %s", self.user)

    async def on_interaction(self, interaction: discord.Interaction) -> None:
        if interaction.type != discord.InteractionType.application_command:
            return
        raw = raw_interaction_from_payload(
            interaction.data or {},
            interaction_id=str(interaction.id),
            server_id=interaction.guild_id,
            user_id=interaction.user.id,
        )
        await self.runtime.handle_command(
            raw, DiscordResponder(interaction, self.platform)
        )

    async def close(self) -> None:
        await self.runtime.shutdown()
        await super().close()

    async def _navigate(self, interaction: discord.Interaction, custom_id: str) -> None:
        try:
            await interaction.response.defer()
        except discord.DiscordException as exc:
            _LOGGER.warning("Could not acknowledge click %s: %s", interaction.id, exc)
        if interaction.message is None:
            return
        action = navigation_action(
            str(interaction.message.id), custom_id, action_id=str(interaction.id)
        )
        if action is not None:
            await self.runtime.handle_navigation(action)
