from typing import TypedDict


class RuleRegistryEntry(TypedDict, total=False):
    short_description: str
    display_name: str
    symbol: str
    message_template: str
    identifier: str
    manual_instructions: str
    references: list[str]
    rule_id: str
