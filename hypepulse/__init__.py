"""
HypePulse - Hypixel statistics for Discord.

Answers slash commands with Mojang/Hypixel lookups, cached in memory and
paginated when a reply does not fit a single message.
"""
