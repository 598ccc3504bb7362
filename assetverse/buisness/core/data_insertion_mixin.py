"""
Generic data insertion mixin for SQLAlchemy models
Provides from_dict and to_dict methods for automatic data insertion

Incoming payloads use the camelCase keys of the public JSON API
(``productName``, ``requesterEmail`` ...). ``from_dict`` accepts either that
form or the snake_case column names; ``to_dict`` can emit either.
"""

import re
from datetime import datetime
from sqlalchemy import inspect

_CAMEL_BOUNDARY = re.compile(r'(?<!^)(?=[A-Z])')


def to_snake(key):
    return _CAMEL_BOUNDARY.sub('_', key).lower()


def to_camel(key):
    head, *rest = key.split('_')
    return head + ''.join(part.title() for part in rest)


class DataInsertionMixin:
    """
    Mixin that provides generic data insertion capabilities for SQLAlchemy models

    This mixin adds:
    - from_dict(): Create model instance from dictionary
    - to_dict(): Convert model instance to dictionary
    """

    @classmethod
    def from_dict(cls, data_dict, skip_fields=None):
        """
        Create a model instance from a dictionary

        Args:
            data_dict (dict): Dictionary containing model data (camelCase or snake_case keys)
            skip_fields (list, optional): Column names to skip during creation

        Returns:
            Model instance (not saved to database)
        """
        if skip_fields is None:
            skip_fields = []

        mapper = inspect(cls)
        columns = {c.key for c in mapper.columns}

        filtered_data = {}
        for key, value in data_dict.items():
            column = key if key in columns else to_snake(key)
            if column not in columns or column in skip_fields:
                continue
            if column == 'id':
                # Identity is always assigned by the database
                continue
            filtered_data[column] = value

        return cls(**filtered_data)

    def to_dict(self, camel_case=True):
        """
        Convert model instance to dictionary

        Args:
            camel_case (bool): Emit camelCase keys as used by the JSON API

        Returns:
            dict: Dictionary representation of the model
        """
        result = {}

        mapper = inspect(self.__class__)

        for column in mapper.columns:
            value = getattr(self, column.key)
            key = to_camel(column.key) if camel_case else column.key

            if isinstance(value, datetime):
                result[key] = value.isoformat()
            else:
                result[key] = value

        return result
