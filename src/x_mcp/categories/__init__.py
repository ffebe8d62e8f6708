"""
X MCP Tools - Category Modules

Organized by functional area of the X API:
- tweets: Timelines, lookup, posting, quoting, replying, liking, search
- users: Follow / unfollow, user lookup by handle
- trends: Trend locations
- lists: List creation, membership, owned lists
"""
