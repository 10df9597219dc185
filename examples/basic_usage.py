"""Basic usage example for versefill."""
import asyncio

from versefill import ScriptureField
from versefill.providers import CallbackNotifier, StaticResolver

VERSES = {
    "John 3:16": "For God so loved the world, that he gave his only begotten Son, "
                 "that whosoever believeth in him should not perish, but have everlasting life.",
    "Romans 8:28": "And we know that all things work together for good to them that love God, "
                   "to them who are the called according to his purpose.",
}


async def main():
    resolver = StaticResolver(VERSES)
    notifier = CallbackNotifier(lambda kind, message: print(f"[{kind.value}] {message}"))

    # Example 1: Expand citations as they are typed
    print("=== Example 1: Live expansion ===")
    field = ScriptureField(
        resolver,
        notifier=notifier,
        on_status_change=lambda c: print(f"  {c.raw_text}: {c.status.value}"),
    )

    for word in "See John 3:16 and Romans 8:28 and Jude 1:24".split(" "):
        # Always type on top of what the field holds, expansions included
        field.on_text_change(f"{field.text} {word}".lstrip())
        await asyncio.sleep(0)

    await field.drain()
    print(f"\nFinal text:\n{field.text}")

    # Example 2: Retry a failed citation once the verse table knows it
    print("\n=== Example 2: Manual retry ===")
    for citation in field.affordances():
        print(f"Expandable: {citation.raw_text} ({citation.status.value})")

    resolver.add("Jude 1:24", "Now unto him that is able to keep you from falling, "
                              "and to present you faultless before the presence of his glory with exceeding joy,")
    field.request_expand("Jude 1:24")
    await field.drain()
    print(f"\nFinal text:\n{field.text}")

    field.dispose()


if __name__ == "__main__":
    asyncio.run(main())
