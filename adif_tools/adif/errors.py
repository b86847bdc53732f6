"""
Exceptions raised while reading and building ADIF records
"""


class AdifError(Exception):
    pass


class MalformedRecord(AdifError, ValueError):
    """
    A tag couldn't be parsed, e.g. a field length which isn't a non-negative integer
    """


class TruncatedInput(AdifError):
    """
    The stream ended in the middle of a tag or a field value. Readers treat this as the
    end of the stream and drop the partial record.
    """


class UnknownRecordKind(AdifError, ValueError):
    pass
