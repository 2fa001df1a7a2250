# Routes package init
"""
Songbook Backend - API Routes Package
======================================

Route Inventory:
    - songs.py:   GET/POST       /songs/        (list, create)
                  GET/PUT/DELETE /songs/{id}    (get, update, delete)
    - health.py:  GET            /health        (service health check)

Routes stay thin: parse the request, call the controller, encode the result.
"""
