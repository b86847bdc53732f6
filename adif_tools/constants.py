from pathlib import Path

# ADIF files are plain ASCII in practice. Latin-1 maps every byte to exactly one
# character, so field lengths count the same either way.
DEFAULT_ENCODING = "iso-8859-1"

DATA_DIR = Path(Path(__file__).parent, "adif", "data")
DXCC_TABLE = Path(DATA_DIR, "dxcc.txt")
CONT_TABLE = Path(DATA_DIR, "cont.txt")

DEFAULT_ADIF_VERSION = "3.1.4"
DEFAULT_PROGRAM_ID = "adif_tools"

# ADIF fields, in order, making up the sent and received contest exchange
DEFAULT_TX_EXCHANGE = "rst_sent stx stx_string"
DEFAULT_RX_EXCHANGE = "rst_rcvd srx srx_string"

UNKNOWN = "UNKNOWN"
