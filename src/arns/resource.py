"""
Module for working with the resource section of ARNs (Amazon Resource Names).
"""
import unicodedata

NULL_PLACEHOLDER = "null"
"""
Text rendered by ArnResource.__str__ in place of an absent resource type or qualifier.
"""

TYPE_DELIMITERS = (":", "/")
QUALIFIER_DELIMITER = ":"

# Whitespace as the AWS SDK for Java sees it: no-break spaces and NEL do not count.
_NON_BREAKING_SPACES = "\u00a0\u2007\u202f"
_CONTROL_WHITESPACE = "\t\n\u000b\f\r\u001c\u001d\u001e\u001f"


def is_blank(value):
    """
    Checks whether a string is None, empty or consists only of whitespace.

    Unlike str.isspace(), no-break spaces (U+00A0, U+2007, U+202F) and U+0085 are not considered whitespace.

    Parameters
    ----------
    value : str
        The string to check.

    Returns
    -------
    bool
        True if the string is blank.
    """
    if value is None:
        return True
    for char in value:
        if char in _NON_BREAKING_SPACES:
            return False
        if char in _CONTROL_WHITESPACE:
            continue
        if unicodedata.category(char) not in ("Zs", "Zl", "Zp"):
            return False
    return True


def _rebuild(resource_type, resource, qualifier):
    return (
        ArnResourceBuilder()
        .resource_type(resource_type)
        .resource(resource)
        .qualifier(qualifier)
        .build()
    )


class BlankResourceError(ValueError):
    """
    Raised when an ArnResource would be built without a resource, or with an empty or whitespace-only one.
    """

    def __init__(self, message="resource must not be blank or empty."):
        super().__init__(message)


class ArnResource:
    """
    Represents the resource section of an Amazon Resource Name.

    If the resource type is not present, resource holds the entire resource section of the ARN.

    Instances are immutable. Use to_copy_builder() to derive a modified copy.

    Attributes
    ----------
    resource_type : str
        The type of the resource, or None if the resource section did not contain one.
    resource : str
        The resource name or resource path. Never blank.
    qualifier : str
        The resource qualifier, such as a version or alias, or None if not present.
    """

    __slots__ = ("_resource_type", "_resource", "_qualifier")

    def __init__(self, builder):
        """
        Initializes an ArnResource object from a builder. Use ArnResourceBuilder.build() instead of calling this directly.

        Parameters
        ----------
        builder : arns.resource.ArnResourceBuilder
            The builder holding the field values.

        Raises
        ------
        arns.resource.BlankResourceError
            If the resource of the builder is unset or blank.
        """
        if is_blank(builder.get_resource()):
            raise BlankResourceError()
        object.__setattr__(self, "_resource_type", builder.get_resource_type())
        object.__setattr__(self, "_resource", builder.get_resource())
        object.__setattr__(self, "_qualifier", builder.get_qualifier())

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (_rebuild, (self._resource_type, self._resource, self._qualifier))

    @property
    def resource_type(self):
        """
        Returns the type of the resource.

        Returns
        -------
        str
            The text before the first ':' or '/' of the resource section, or None if there was no such delimiter.
        """
        return self._resource_type

    @property
    def resource(self):
        """
        Returns the resource name or path.

        If the resource type is not present, this is the entire resource section of the ARN.

        Returns
        -------
        str
            The resource identifier.
        """
        return self._resource

    @property
    def qualifier(self):
        """
        Returns the resource qualifier, such as a function version or alias.

        Returns
        -------
        str
            The text after the last ':' following the resource type, or None if not present.
        """
        return self._qualifier

    @classmethod
    def builder(cls):
        """
        Returns an empty builder for ArnResource.

        Returns
        -------
        arns.resource.ArnResourceBuilder
            A new builder.
        """
        return ArnResourceBuilder()

    @classmethod
    def from_string(cls, resource):
        """
        Parses the resource section of an ARN.

        Matches:

            resource-id
            resource-type:resource-id
            resource-type/resource-id
            resource-type:resource-id:qualifier
            resource-type/resource-id:qualifier

        resource-id may be a resource name or a resource path. The first ':' or '/' always ends the resource type and
        the last ':' after it always starts the qualifier.

        Parameters
        ----------
        resource : str
            The resource section to parse.

        Returns
        -------
        arns.resource.ArnResource
            The parsed resource.

        Raises
        ------
        arns.resource.BlankResourceError
            If the resource identifier part of the string is empty or whitespace.
        """
        type_boundary = None
        qualifier_boundary = None

        for idx, char in enumerate(resource):
            if char in TYPE_DELIMITERS:
                type_boundary = idx
                break

        if type_boundary is not None:
            for idx in range(len(resource) - 1, type_boundary, -1):
                if resource[idx] == QUALIFIER_DELIMITER:
                    qualifier_boundary = idx
                    break

        if type_boundary is None:
            return cls.builder().resource(resource).build()
        if qualifier_boundary is None:
            return (
                cls.builder()
                .resource_type(resource[:type_boundary])
                .resource(resource[type_boundary + 1 :])
                .build()
            )
        return (
            cls.builder()
            .resource_type(resource[:type_boundary])
            .resource(resource[type_boundary + 1 : qualifier_boundary])
            .qualifier(resource[qualifier_boundary + 1 :])
            .build()
        )

    def to_copy_builder(self):
        """
        Returns a builder pre-populated with the fields of this resource. Changes to the builder do not affect this object.

        Returns
        -------
        arns.resource.ArnResourceBuilder
            A new builder.
        """
        return (
            self.builder()
            .resource_type(self._resource_type)
            .resource(self._resource)
            .qualifier(self._qualifier)
        )

    def to_dict(self):
        """
        Returns the fields of this resource as a dict, with None for absent fields.

        Returns
        -------
        dict
            The resource_type, resource and qualifier of this object.
        """
        return {
            "resource_type": self._resource_type,
            "resource": self._resource,
            "qualifier": self._qualifier,
        }

    def render(self, placeholder=NULL_PLACEHOLDER):
        """
        Renders the resource as resource_type:resource:qualifier. Both separators are always present.

        Parameters
        ----------
        placeholder : str
            Text to render in place of an absent resource type or qualifier.

        Returns
        -------
        str
            The rendered resource.
        """
        resource_type = (
            placeholder if self._resource_type is None else self._resource_type
        )
        qualifier = placeholder if self._qualifier is None else self._qualifier
        return f"{resource_type}:{self._resource}:{qualifier}"

    def __str__(self):
        return self.render()

    def __repr__(self):
        return (
            f"ArnResource(resource_type={self._resource_type!r}, "
            f"resource={self._resource!r}, qualifier={self._qualifier!r})"
        )

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, ArnResource):
            return NotImplemented
        return (
            self._resource_type == other._resource_type
            and self._resource == other._resource
            and self._qualifier == other._qualifier
        )

    def __hash__(self):
        return hash((self._resource_type, self._resource, self._qualifier))


class ArnResourceBuilder:
    """
    Mutable staging object for ArnResource. Each setter replaces the previous value and returns the builder.
    """

    def __init__(self):
        self._resource_type = None
        self._resource = None
        self._qualifier = None

    def resource_type(self, resource_type):
        """
        Sets the type of the resource. None or an empty string are permitted.
        """
        self._resource_type = resource_type
        return self

    def resource(self, resource):
        """
        Sets the resource name or path.
        """
        self._resource = resource
        return self

    def qualifier(self, qualifier):
        """
        Sets the qualifier of the resource. None or an empty string are permitted.
        """
        self._qualifier = qualifier
        return self

    def get_resource_type(self):
        """
        Returns the resource type set on the builder, or None.
        """
        return self._resource_type

    def get_resource(self):
        """
        Returns the resource set on the builder, or None.
        """
        return self._resource

    def get_qualifier(self):
        """
        Returns the qualifier set on the builder, or None.
        """
        return self._qualifier

    def build(self):
        """
        Creates an ArnResource from the current builder values.

        Returns
        -------
        arns.resource.ArnResource
            The new resource object.

        Raises
        ------
        arns.resource.BlankResourceError
            If the resource is unset, empty or whitespace.
        """
        return ArnResource(self)


def parse_resource(raw):
    """
    Shorthand for ArnResource.from_string().
    """
    return ArnResource.from_string(raw)
