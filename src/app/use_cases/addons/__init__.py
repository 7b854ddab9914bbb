"""Addon item use cases"""
from .manage_addons import CreateAddon, UpdateAddon, DeactivateAddon, ListAddons
from .dtos import CreateAddonCommandDTO, UpdateAddonCommandDTO, AddonDTO

__all__ = [
    "CreateAddon",
    "UpdateAddon",
    "DeactivateAddon",
    "ListAddons",
    "CreateAddonCommandDTO",
    "UpdateAddonCommandDTO",
    "AddonDTO",
]
