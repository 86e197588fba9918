# Copyright (c) 2025 Red Hat, Inc.
# Copyright Contributors to the Open Cluster Management project

import sys

from .cli import main

sys.exit(main())
