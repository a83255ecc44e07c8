import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

import discord

from .errors import ChannelResolutionError, NotificationSendError
from .page import ATTACKER_EMOJI, DEFENDER_EMOJI, gang_color, gang_emoji

EMBED_DESCRIPTION = "დაიწყოო!"
EMBED_FOOTER = "Capture Bot • Stay alert!"
BUTTON_LABEL = "გადასვლა საიტზე"


@dataclass
class NotifyResult:
    ok: bool
    error: Optional[str] = None


def build_capture_embed(capture):
    """Embed announcing a capture start; accent color follows the attacking gang."""
    g1, g2 = capture.gang1, capture.gang2
    emoji1 = gang_emoji(g1, ATTACKER_EMOJI)
    emoji2 = gang_emoji(g2, DEFENDER_EMOJI)

    embed = discord.Embed(
        color=gang_color(g1),
        title=f"{emoji1} {g1.upper()} vs {emoji2} {g2.upper()}",
        description=EMBED_DESCRIPTION,
        timestamp=discord.utils.utcnow(),
    )
    embed.add_field(name="⏰ დაწყების დრო", value=f"**{capture.start}**", inline=True)
    embed.add_field(name="🔫 იარაღი", value=f"**{capture.weapon}**", inline=True)
    embed.add_field(name="⚔️ შეტევა", value=f"{emoji1} **{g1.upper()}**", inline=True)
    embed.add_field(name="🛡️ დაცვა", value=f"{emoji2} **{g2.upper()}**", inline=True)
    embed.set_footer(text=EMBED_FOOTER)
    return embed


def build_link_view(site_url):
    # discord.ui.View needs a running event loop, so only call this from a coroutine
    view = discord.ui.View()
    view.add_item(discord.ui.Button(label=BUTTON_LABEL, url=site_url, style=discord.ButtonStyle.link))
    return view


class DiscordNotifier:
    """Posts capture announcements to one channel from any thread."""

    def __init__(self, client, channel_id):
        self.client = client
        self.channel_id = int(channel_id)

    def resolve_channel(self):
        channel = self.client.get_channel(self.channel_id)
        if channel is None:
            raise ChannelResolutionError(f"Channel not found. Check CHANNEL_ID ({self.channel_id}).")
        return channel

    def notify_capture(self, capture, site_url):
        """Queue the announcement on the client's loop.

        The result covers what is known synchronously (client ready, channel
        resolved); a rejected send is logged when the coroutine finishes.
        """
        if not self.client.is_ready():
            return NotifyResult(False, "Discord client is not ready")

        try:
            channel = self.resolve_channel()
        except ChannelResolutionError as e:
            return NotifyResult(False, str(e))

        embed = build_capture_embed(capture)
        future = asyncio.run_coroutine_threadsafe(self._send(channel, embed, site_url), self.client.loop)
        future.add_done_callback(self._log_send_result)
        return NotifyResult(True)

    async def _send(self, channel, embed, site_url):
        try:
            await channel.send(embed=embed, view=build_link_view(site_url))
        except discord.HTTPException as e:
            raise NotificationSendError(f"Send error: {e}") from e

    @staticmethod
    def _log_send_result(future):
        if future.cancelled():
            logging.warning("Capture announcement was cancelled")
            return
        error = future.exception()
        if error is not None:
            logging.error(f"{error}")
        else:
            logging.info("Embed + site link sent.")
