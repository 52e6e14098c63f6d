"""Performs simple text formatting on tabular data to produce data
files or readable tables."""

import sys

GATE_FIELD = 'matches'

class Field:
    def __init__(self, fieldID, fieldName=None, align=None, type=None,
            precision=None, gate=None):
        """Create a Field.
        @param fieldID  Used to access the Field (required).
        @param  fieldName   Displayed name (defaults to fieldID).
        @param  align  Determines alignment: <, >, or ^.
        @param  type  Determines how to format values for printing.
                      (int, float, percent, str)
        @param  gate  Minimum sample: when the row's match count is below
                      this, the value is displayed as 'n<gate' instead.
        """
        self.id = fieldID
        self.name = self.id
        self.align = align
        self.type = type
        self.precision = precision
        self.gate = gate
        if self.align is None and self.type is not None:
            #By default, right-justify numbers.
            if self.type in ('int', 'float', 'percent'):
                self.align = '>'
        if fieldName is not None:
            self.name = fieldName

    def isGated(self, row):
        return bool(self.gate) and row.get(GATE_FIELD, 0) < self.gate

    def formatData(self, value):
        """Formats a value of the field for printing as data."""
        if value is None:
            if self.type in ('int', 'float', 'percent'):
                return 'NaN'
            return ''
        formatstr = '{0!s}'
        if self.type == 'int':
            value = int(value)
            formatstr = '{0:d}'
        elif self.type in ('float', 'percent'):
            value = float(value)
            if self.precision is None:
                formatstr = '{0:.4f}'
            else:
                formatstr = '{{0:.{0}f}}'.format(self.precision)
        return formatstr.format(value)

    def formatText(self, value):
        """Formats a value of the field for printing as readable text."""
        if value is None:
            return '---'
        formatstr = '{0!s}'
        if self.type == 'int':
            value = int(value)
            formatstr = '{0:d}'
        elif self.type == 'float':
            value = float(value)
            if self.precision is None:
                formatstr = '{0:.2f}'
            else:
                formatstr = '{{0:.{0}f}}'.format(self.precision)
        elif self.type == 'percent':
            value = 100 * float(value)
            if self.precision is None:
                formatstr = '{0:.1f}%'
            else:
                formatstr = '{{0:.{0}f}}%'.format(self.precision)
        return formatstr.format(value)

    def formatCell(self, row):
        """Readable text for this field of a row, honoring the gate."""
        if self.isGated(row):
            return 'n<{0}'.format(self.gate)
        return self.formatText(row.get(self.id))

class Table:
    def __init__(self, title=None):
        self.title = title
        self.data = []
        self.fields = []

    def __len__(self):
        return len(self.data)

    def addField(self, field):
        """Add a Field (column)."""
        self.fields.append(field)

    def addRecord(self, *args, **extra):
        """Add a record, where each argument is a field value (in order).
        Keyword arguments are stored with the row without being displayed,
        e.g. the match count a gated field is checked against."""
        data = dict(extra)
        for i in range(min(len(self.fields), len(args))):
            data[self.fields[i].id] = args[i]
        self.data.append(data)

    def getColumn(self, fieldID):
        return [ row.get(fieldID) for row in self.data ]

    def formatList(self, data, begin='', end='', between='', prefix='', suffix=''):
        items = [ prefix + item + suffix for item in data ]
        line = begin + between.join(items) + end
        return line

    def printDelim(self, delim='\t', stream=None):
        """Print table with fields delimited by a given string (defaults to
        tab). Gated values are printed raw: gating is for display only.
        @param  stream  Output stream to write to (default is stdout).
        """
        stream = stream or sys.stdout
        escape = '\\' + delim
        fieldNames = [ field.name.replace(delim, escape) for field in self.fields ]
        if self.title:
            stream.write(self.title.replace(delim, escape) + "\n")
        stream.write(self.formatList(fieldNames, between=delim) + "\n")
        for data in self.data:
            strings = [ field.formatData(data.get(field.id)) for field in self.fields ]
            values = [ string.replace(delim, escape) for string in strings ]
            stream.write(self.formatList(values, between=delim) + "\n")

    def printTable(self, vertical='|', horizontal='-', corner='+',
            padding=' ', align='<', limit=None, stream=None):
        """Print as an ASCII table aligned for human viewing.
        @param  vertical  Makes up vertical lines (default '|').
        @param  horizontal  Makes up horizontal lines (default '-').
        @param  corner  Intersection of horizontal and vertical lines (default '+').
        @param  padding Displayed between vertical line and value (default ' ').
        @param  align   Determines alignment of values: '<', '>', or '^'.
                        Overriden by fields' alignments.
        @param  limit   Only print the top X records.
        @param  stream  Output stream to write to (default is stdout).
        Corner and vertical should be the same width.
        Horizontal should be one character wide.
        """
        stream = stream or sys.stdout
        rows = self.data[:limit] if limit else self.data
        sizes = {}
        formatstr = {}
        hline = None
        for field in self.fields:
            lengths = [ len(field.formatCell(data)) for data in rows ]
            lengths.append(len(field.name))
            sizes[field.id] = max(lengths)
            fieldAlign = field.align or align
            formatstr[field.id] = '{{0:{0}{1}}}'.format(fieldAlign, sizes[field.id])
        if horizontal:
            items = [ horizontal * sizes[field.id] for field in self.fields ]
            hpad = horizontal * len(padding)
            hline = self.formatList(items, begin=corner, end=corner,
                    between=corner, prefix=hpad, suffix=hpad)
        if self.title:
            stream.write(self.title)
            stream.write('\n')
        if hline:
            stream.write(hline)
            stream.write('\n')
        names = [ formatstr[field.id].format(field.name) for field in self.fields ]
        stream.write(self.formatList(names, begin=vertical, end=vertical,
                between=vertical, prefix=padding, suffix=padding))
        stream.write('\n')
        if hline:
            stream.write(hline)
            stream.write('\n')
        for data in rows:
            values = [ formatstr[field.id].format(field.formatCell(data))
                    for field in self.fields ]
            stream.write(self.formatList(values, begin=vertical, end=vertical,
                    between=vertical, prefix=padding, suffix=padding))
            stream.write('\n')
        if hline:
            stream.write(hline)
            stream.write('\n')

    def write(self, output='table', limit=None, stream=None):
        """Print in one of the output formats: table, tab or csv."""
        if output == 'tab':
            self.printDelim('\t', stream=stream)
        elif output == 'csv':
            self.printDelim(',', stream=stream)
        else:
            self.printTable(limit=limit, stream=stream)
