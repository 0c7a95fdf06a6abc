from aisamples.flows.basic import run_basic_sample
from aisamples.flows.streaming import run_streaming_sample
from aisamples.flows.connection import run_connection_sample

SAMPLES = {
    "basic": run_basic_sample,
    "streaming": run_streaming_sample,
    "connection": run_connection_sample,
}
