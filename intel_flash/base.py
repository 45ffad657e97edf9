'''Base provides basic flash object structures.
'''

import ctypes

from .errors import InvalidRecordSizeError


class FirmwareObject(object):
    '''A pseudo-abstract type providing common firmware member facilities.'''

    @property
    def content(self):
        '''The object content is the 'data' stream.'''
        if getattr(self, "data", None) is not None:
            return self.data
        return b""

    @property
    def objects(self):
        '''Objects are the child firmware objects found via 'processing'.'''
        return []

    @property
    def label(self):
        '''An overload for an object 'name'.'''
        if getattr(self, "name", None) is not None:
            return self.name
        return ""

    @property
    def type_label(self):
        '''The string representation of the object's class name.'''
        return self.__class__.__name__

    @property
    def attrs_label(self):
        '''An overload for the 'attrs' field.'''
        if getattr(self, "attrs", None) is not None:
            return self.attrs
        return {}

    def info(self, include_content=False):
        '''Firmware objects define a common interface for information.

        This defines: label, type, content, attrs-- as common between
        most firmware objects.

        Args:
            include_content (Optional[bool]): Include a pointer to the 'data'
            or content stream.

        Return:
            dict: Return a pointer to this object "_self" and the defines listed
                above with an optional pointer to the data stream.
        '''
        return {
            "_self": self,
            "label": self.label,
            "type": self.type_label,
            "content": self.content if include_content else b"",
            "attrs": self.attrs_label
        }

    def iterate_objects(self, include_content=False):
        '''Flatten this object's children into a list.

        Each object within the children list is recursively 'iterated',
        meaning its 'iterate_objects' method is called. The object is
        represented via the 'info' method. Access to the object is possible
        via the "_self" key.

        The output list does not include this object but each entry sets a
        "parent" key with a pointer to this object.

        Return:
            list: flattened list of firmware objects.
        '''
        objects = []
        for _object in self.objects:
            if _object is None:
                continue
            _info = _object.info(include_content)
            _info["objects"] = _object.iterate_objects(include_content)
            for _child in _info["objects"]:
                _child["parent"] = _info
            objects.append(_info)
        return objects


class StructuredObject(object):
    '''A fixed-size little-endian record described by a ctypes field table.

    Subclasses set 'structure_type'; the record size is the size of that
    table. Fields are reachable through 'self.structure.<FieldName>'.
    '''
    structure_type = None

    def parse_structure(self, data, structure=None):
        '''Construct an instance object of the provided structure.'''
        structure = structure or self.structure_type
        struct_size = ctypes.sizeof(structure)
        if len(data) < struct_size:
            raise InvalidRecordSizeError(
                "%s size too small: expected %d bytes, got %d" % (
                    self.__class__.__name__, struct_size, len(data)))

        struct_data = bytes(data[:struct_size])
        self.structure = structure.from_buffer_copy(struct_data)
        self.structure_data = struct_data
        self.structure_fields = [field[0] for field in structure._fields_]

    @property
    def fields(self):
        '''Ordered (name, value) pairs, arrays returned as bytes.'''
        values = []
        for name in self.structure_fields:
            value = getattr(self.structure, name)
            if isinstance(value, ctypes.Array):
                value = bytes(value)
            values.append((name, value))
        return values

    def build(self):
        '''Re-encode the record; identical to the decoded window.'''
        return bytes(self.structure)
