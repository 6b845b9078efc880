"""
Minimal example: keep a version file next to a build.

Run this with:
    python examples/minimal.py

Then inspect the result with:
    cat versionConfig.json
    buildstamp show
"""

import logging

from buildstamp import BuildSettingsPublisher, VersionStage, VersionStore, on_build


def main() -> None:
    logging.basicConfig(level=logging.INFO)

    # Tooling configuration: publish every change to build settings
    publisher = BuildSettingsPublisher(path="build_settings.json")
    store = VersionStore(path="versionConfig.json", publisher=publisher)

    outcome = store.load()
    print(f"Load: {outcome.status.value} ({store.current().version_string})")

    # Editor-style change: new minor release in beta, saved right away
    store.increment_minor()
    store.set_version(
        store.current().major,
        store.current().minor,
        0,
        VersionStage.BETA,
    )
    store.save()

    # What a build pipeline does once per build
    previous, current = on_build(store)
    print(f"Built: {previous} -> {current}")

    print(f"Build settings: {publisher.settings.to_dict()}")


if __name__ == "__main__":
    main()
