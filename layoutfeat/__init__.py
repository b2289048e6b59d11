'''
layoutfeat learns code layout by example. The API provides

    * a read-only model of tokens and parse trees
    * questions about ancestors and vertical alignment in those trees
    * per-token feature vectors and layout labels for a
      nearest-neighbour style formatter
    * helpers to save, load and inspect the resulting tables
'''
