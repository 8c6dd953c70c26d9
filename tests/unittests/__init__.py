# This file is part of firstboot. See LICENSE file for license information.
