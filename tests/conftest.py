import os
import tempfile

# keep log files out of the real home directory
os.environ.setdefault("NEURON_ZK_HOME", tempfile.mkdtemp(prefix="neuron-zk-test-"))
