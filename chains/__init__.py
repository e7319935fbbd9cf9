from chains.dto import ChainConfig, TokenEntry
