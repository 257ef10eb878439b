# Models package init
"""
Homebase Backend: ORM Models
============================

    - property.py:  `properties` table (real-estate holdings per user)
    - movie.py:     `movies` table (movie list per user)

Column names keep the camelCase spelling the frontend and existing databases
use ("userId", "formattedAddress", ...). Python attributes are snake_case.
"""
