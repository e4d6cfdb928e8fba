"""
StoryVote: collaborative storytelling service.

Anonymous users submit and vote on phrases during four daily session slots;
winning phrases become video episodes that accumulate into stories.
"""

__version__ = "0.1.0"
