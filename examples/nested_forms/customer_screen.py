# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Customer screen - Example of nested components sharing one form.

A didactic example: a screen component owns the Registry, a header
component registers the root form, and an address component (which does
not know when the header runs) waits for the form before adding its own
group.
"""

from __future__ import annotations

import logging

from genro_formregistry import Control, Group, Registry


class InputField:
    """Stand-in for a UI input control."""

    def __init__(self, value: str = ''):
        self.value = value

    def __repr__(self) -> str:
        return f"InputField({self.value!r})"


class HeaderComponent:
    """Registers the 'customer' root form."""

    def __init__(self, registry: Registry):
        self.registry = registry

    def mount(self) -> None:
        form = Group({'name': Control(InputField('Ada')), 'email': Control(InputField())})
        self.registry.register_root('customer', form)


class AddressComponent:
    """Adds an 'address' group below 'customer' once it exists."""

    def __init__(self, registry: Registry):
        self.registry = registry
        self.subscription = registry.when_available('customer', self._attach)

    def _attach(self, form: Group) -> None:
        address = Group({'street': Control(InputField()), 'zip': Control(InputField())})
        self.registry.register_element('customer', 'address', address)


def main() -> None:
    logging.basicConfig(level=logging.DEBUG)
    with Registry('customer-screen') as registry:
        registry.subscribe(lambda e: print(f"{e.kind.name:<20} {e.path}"))
        AddressComponent(registry)  # mounted first, waits
        HeaderComponent(registry).mount()

        for path, node in registry.walk():
            print(path, node.kind.value)
        print(registry.get_root().as_dict())


if __name__ == '__main__':
    main()
