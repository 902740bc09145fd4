from ..domain.models import PathClass

HDFS_SCHEME = "hdfs://"

def classify(location: str) -> PathClass:
    # Substring match: the scheme is not always at the start of the location text
    if HDFS_SCHEME in location:
        return PathClass.MEASURABLE
    return PathClass.UNMEASURABLE
