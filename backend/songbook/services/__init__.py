# Services package init
"""
Songbook Backend - Services Layer
==================================

Service Inventory:
    - validation: id and field rules applied before any store call
    - SongStore (abstract) / SqlAlchemySongStore: persistence adapter
    - SongController: list/get/create/update/delete over an injected store
"""
